"""Allow ``python -m gql_spansql``."""

import sys

from gql_spansql.cli import main

sys.exit(main())
