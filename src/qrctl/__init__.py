"""qrctl — QR code encode/decode CLI utility."""

__version__ = "0.1.0"
