"""Derived text and JSON outputs for a craftlog."""

from .instructions import InstructionParams, generate_instructions
from .summary import generate_summary

__all__ = ["InstructionParams", "generate_instructions", "generate_summary"]
