"""Infrastructure layer — adapters over the imaging and QR libraries.

Wraps Pillow (image container codec), zxing-cpp (symbol finder/decoder)
and qrcode (symbol generator and shape rendering). Modules here may use
domain value types but must never import from services, commands, or output.
"""
