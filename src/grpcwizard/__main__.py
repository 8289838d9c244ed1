# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Allow ``python -m grpcwizard``."""

from grpcwizard.cli import main

if __name__ == "__main__":
    main()
