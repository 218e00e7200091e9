"""seqvault - convert Logseq outline pages into Obsidian notes."""

__version__ = "0.3.0"
