"""Pure helpers: sequence diffing and canonical JSON rendering."""
