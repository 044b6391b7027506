"""Device abstraction for the tensors backing qvector matrices."""

from __future__ import annotations

import torch


class Device:
    """
    A named placement for matrix storage: a PyTorch device plus the complex
    dtype used for every element.

    Instances are treated as immutable once constructed.
    """

    def __init__(
        self,
        name: str,
        torch_device: torch.device,
        complex_dtype: torch.dtype = torch.complex128,
    ) -> None:
        """
        Initialize a Device.

        Args:
            name: Logical device name ("cpu" or "cuda").
            torch_device: Underlying PyTorch device.
            complex_dtype: Element dtype. complex128 keeps real and imaginary
                parts as 64-bit floats.
        """
        self.name = name
        self.torch_device = torch_device
        self.complex_dtype = complex_dtype

    def __repr__(self) -> str:
        return (
            f"Device(name={self.name!r}, torch_device={self.torch_device}, "
            f"complex_dtype={self.complex_dtype})"
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Device):
            return NotImplemented
        return (
            self.name == other.name
            and self.torch_device == other.torch_device
            and self.complex_dtype == other.complex_dtype
        )

    def __hash__(self) -> int:
        return hash((self.name, str(self.torch_device), self.complex_dtype))

    def as_torch_device(self) -> torch.device:
        """Return the underlying PyTorch device."""
        return self.torch_device


def device(name: str) -> Device:
    """
    Create a Device from its name.

    Supported names:
        - "cpu": host memory
        - "cuda": GPU memory (only if CUDA is available)

    Raises:
        RuntimeError: If "cuda" is requested but CUDA is not available.
        ValueError: If the device name is not supported.
    """
    if name == "cpu":
        return Device(name="cpu", torch_device=torch.device("cpu"))
    if name == "cuda":
        if not torch.cuda.is_available():
            raise RuntimeError(
                "CUDA device requested but torch.cuda.is_available() is False"
            )
        return Device(name="cuda", torch_device=torch.device("cuda"))

    supported = ["cpu", "cuda"]
    raise ValueError(
        f"Unsupported device name: {name!r}. Supported devices: {supported}"
    )


def default_device() -> Device:
    """Return the default (CPU) device."""
    return device("cpu")


def resolve_device(spec: Device | str | torch.device | None) -> Device:
    """Accept a Device, a device name, a torch.device or None and return a Device."""
    if spec is None:
        return default_device()
    if isinstance(spec, Device):
        return spec
    if isinstance(spec, str):
        return device(spec)
    if isinstance(spec, torch.device):
        return Device(name=spec.type, torch_device=spec)
    raise TypeError(
        f"device must be Device, str, torch.device, or None, got {type(spec)}"
    )
