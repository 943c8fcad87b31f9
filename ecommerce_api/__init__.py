"""E-commerce API with request correlation, structured logging and metrics"""

__version__ = "1.0.0"
