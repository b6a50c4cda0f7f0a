"""Test suite package marker so nested test modules get fully qualified names."""
