"""Barbearia Master application layer: session routing, services and screens."""
