"""HTTP adapter over the inventory workspace."""
