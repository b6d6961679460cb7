"""dotnetreports - report path registry for .NET static analysis runs."""

__version__ = "0.1.0"
