"""Building blocks for long-running services: conversion, dataclass binding, text helpers, task and timer engines, trace ids and CSV I/O."""

__version__ = "1.0.0"