"""Run the Reddyt API: python -m reddyt"""

from reddyt.main import run

run()
