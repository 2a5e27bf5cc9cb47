"""Session orchestration for document generation and simplification."""
