# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""HTTP layer: negotiation, resources, and the blueprints that expose them."""
