"""Core: dominio, configuración, tabla de despacho y orquestación del lookup."""
