"""Kontext - switch Kubernetes contexts and namespaces from the terminal"""

__version__ = "0.1.0"
