"""Smart house model with a TCP-controlled socket and a UDP-fed thermometer."""

__version__ = "0.1.0"