"""Backend interface shared by every way of running a circuit."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Optional

from qvector.circuit.core import QuantumCircuit


class Backend(ABC):
    """
    Executes a :class:`QuantumCircuit` and returns some representation of the
    result. The output type is backend specific: the statevector backend
    returns the final amplitude vector.
    """

    @abstractmethod
    def execute(self, circuit: QuantumCircuit, initial_state: Optional[Any] = None) -> Any:
        """Run ``circuit`` and return the backend's output."""
        raise NotImplementedError
