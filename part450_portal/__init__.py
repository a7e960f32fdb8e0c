"""Part 450 Licensing Portal — field extraction, compliance scoring and auto-fill."""

__version__ = "0.1.0"
