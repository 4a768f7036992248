"""Audio processing test bench: timing harness, meters, FFT and scope frames, noise and test-signal generators."""

__version__ = "0.1.0"