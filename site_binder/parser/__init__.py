"""site_binder.parser: извлечение статей из HTML."""
