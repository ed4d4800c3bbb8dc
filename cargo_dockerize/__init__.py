"""cargo-dockerize - build, containerize and export Cargo projects.

This package orchestrates `cargo build --release`, a container image build
stamped with OCI provenance labels, and an optional compressed image export.
"""

__version__ = "0.2.0"
__all__ = ["__version__"]
