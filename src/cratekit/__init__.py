"""cratekit — scaffold a layered multi-crate Cargo workspace."""

__version__ = "0.1.0"
