"""Servicios de aplicación: las acciones que expone la CLI."""
