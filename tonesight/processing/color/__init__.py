"""
Color processing modules for ToneSight

Includes the fixed D65 BGR/Lab converter and Lab channel handling.
"""

from .lab_converter import bgr_to_lab, lab_to_bgr
from .channels import split_lab, merge_lab

__all__ = [
    "bgr_to_lab",
    "lab_to_bgr",
    "split_lab",
    "merge_lab",
]
