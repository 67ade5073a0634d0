"""Booking domain - booking creation, admin booking views and daily capacity"""
