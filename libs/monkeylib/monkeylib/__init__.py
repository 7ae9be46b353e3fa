"""monkeylib: lexer, Pratt parser and AST for the Monkey language."""

__version__ = "0.1.0"
