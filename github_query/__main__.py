import sys

from github_query.cli import main

sys.exit(main())
