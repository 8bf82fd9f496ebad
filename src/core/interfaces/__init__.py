"""Interfaces/abstracciones del Core.

- Define contratos (Protocol) que implementan adaptadores concretos.
- Las acciones dependen de `TranslationGateway`, no de httpx.
"""
