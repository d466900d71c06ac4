"""Subspecifications for the Poseidon Python specification."""
