"""Tests - gadget completeness, soundness and FloatAdd properties."""
