"""
Merch Studio

Guided product configuration workflow: option catalog, variant matrix,
draft reducer, step machine, compliance checklist and publish gate.
"""

__version__ = "1.0.0"
