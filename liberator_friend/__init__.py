# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Demo site for media-type negotiated, role-protected resources."""
