"""
streamflow – asynchronous notification delivery pipeline.

Import path convention::

    from streamflow.notifications import NotificationRequest
    from streamflow.application.delivery import RetryAwareConsumer
    from streamflow.runtime import StreamflowRuntime
    from streamflow.adapters.fastapi import create_app
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
