"""Servicios del Core: saneado, router, agregador y pipeline de lookup."""
