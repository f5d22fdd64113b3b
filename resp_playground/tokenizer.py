"""Whitespace tokenizer for command text typed into the playground."""

from typing import List


def tokenize(text: str) -> List[str]:
    """Split a command line into arguments on runs of whitespace.

    Empty or blank input gives an empty list, meaning there is no command
    to encode. Quotes have no special meaning.
    """
    if not text:
        return []
    return text.split()


def split_commands(text: str) -> List[List[str]]:
    """Tokenize every non-blank, non-comment line of a multi-line input"""
    commands = []
    for line in text.splitlines():
        if line.strip().startswith('#'):
            continue
        parts = tokenize(line)
        if parts:
            commands.append(parts)
    return commands
