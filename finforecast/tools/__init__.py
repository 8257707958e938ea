# Re-export tool modules so `from finforecast import tools; tools.pnl...` works.
from . import pnl  # profit & loss reports
