"""Qt integration for presenting and rendering edits."""
