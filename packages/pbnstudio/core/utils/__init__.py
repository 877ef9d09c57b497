"""Shared utilities for pbnstudio."""

from pbnstudio.core.utils.color import hex_to_rgb, rgb_to_hex
from pbnstudio.core.utils.data_url import decode_data_url, encode_data_url, save_data_url

__all__ = [
    "decode_data_url",
    "encode_data_url",
    "hex_to_rgb",
    "rgb_to_hex",
    "save_data_url",
]
