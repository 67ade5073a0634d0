"""Mobile Cleanic - car detailing booking API and mobile checkout core"""

__version__ = "1.0.0"
