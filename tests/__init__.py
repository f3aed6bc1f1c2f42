"""Test suite for mdtag."""
