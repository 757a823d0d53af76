"""
Ticket utilities

- tokens: access token minting and normalization
- qr_utils: QR code rendering
- artifacts: deterministic artifact naming and registration URLs
"""
