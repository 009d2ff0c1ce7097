import sys

from hmac_otp.otp_cli import main

sys.exit(main())
