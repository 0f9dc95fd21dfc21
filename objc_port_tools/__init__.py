"""Source rewriting tools for porting Objective-C code to 64-bit."""

__version__ = "1.0.0"
