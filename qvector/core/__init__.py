"""Scalar and matrix primitives plus device configuration."""

from .complex import Complex
from .device import Device, default_device, device, resolve_device
from .matrix import Matrix

__all__ = ["Complex", "Matrix", "Device", "device", "default_device", "resolve_device"]
