__title__ = "reru"
__description__ = "A small fluent builder for sending HTTP requests."
__version__ = "0.1.0"
