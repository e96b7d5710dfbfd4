# SPDX-License-Identifier: MIT
"""Toolchain settings and discovery."""
