"""Core package of cryptomarinara: errors, hex codec, configuration and logging."""
