import sys

from certificate_mailer.main import main

if __name__ == "__main__":
    sys.exit(main())
