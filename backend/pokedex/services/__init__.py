"""Service Layer — composes dataset store and pure query functions."""
