"""svcat — service catalog provisioning CLI."""

__version__ = "0.1.0"
