"""blogpipe: asset pipeline and theme scripts for statically generated blogs."""

__version__ = "0.1.0"
