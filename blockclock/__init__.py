"""Panel text layouts for a multi-panel Bitcoin ticker, plus a QR Code encoder."""

__version__ = "0.1.0"