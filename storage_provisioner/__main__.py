import sys

from storage_provisioner.cli import main

sys.exit(main())
