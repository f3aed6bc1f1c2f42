"""mdtag: LLM-generated, vocabulary-consistent tags for markdown vaults."""

__version__ = "0.1.0"
