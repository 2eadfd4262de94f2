__title__ = "qhttp"
__description__ = "A small httpie-style HTTP client for the terminal."
__version__ = "0.3.0"
