# SPDX-License-Identifier: MIT
"""Core data model, option resolution and flag tables."""
