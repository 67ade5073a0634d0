"""Customer domain - admin customer records"""
