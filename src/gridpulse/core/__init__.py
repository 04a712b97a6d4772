"""Core types shared by every gridpulse component."""
