"""
Module: images

Purpose:
    Ingestion of uploaded files into decoded library images.

Key Functions:
    - load_images(): Decode a batch concurrently
    - decode_image(): Decode one input

Key Classes:
    - ImageInput: One uploaded file
    - LoadReport: Batch result
    - DecodeFailure: Per-item decode error
"""

from .loader import DecodeFailure, ImageInput, LoadReport, decode_image, load_images

__all__ = [
    "DecodeFailure",
    "ImageInput",
    "LoadReport",
    "decode_image",
    "load_images",
]
