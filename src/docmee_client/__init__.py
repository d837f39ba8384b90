"""Docmee PPT generation client and its HTTP facade."""
