"""xlagent: chat with a completion endpoint and work with Excel workbooks."""

__version__ = "0.1.0"
