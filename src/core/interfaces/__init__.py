"""Interfaces/abstracciones del Core.

Por qué:
- Define contratos (Protocol) que implementan adaptadores concretos.
- Permite invertir dependencias: el Core depende de abstracciones, y los
  tests pueden sustituir el fetcher HTTP por uno falso.
"""
