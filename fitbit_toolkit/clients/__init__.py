from fitbit_toolkit.clients.base import BaseClient, join_url
from fitbit_toolkit.clients.fitbit import FitbitClient

__all__ = ['BaseClient', 'FitbitClient', 'join_url']
