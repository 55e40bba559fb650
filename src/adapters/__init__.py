"""Adaptadores de I/O: cliente HTTP, fetcher concurrente, normalizadores, exportación."""
