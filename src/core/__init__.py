"""Core: dominio, configuración, validación y acciones (sin detalles de HTTP)."""
