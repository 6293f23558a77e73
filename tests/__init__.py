"""Test suite package for the employer search core."""
