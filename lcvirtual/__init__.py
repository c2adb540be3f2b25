"""lcvirtual - CLI for LeetCode virtual contests."""

__version__ = "1.0.0"
