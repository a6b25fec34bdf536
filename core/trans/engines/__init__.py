"""Translation provider implementations.

Importing this package registers every provider with TransInterface.

Modules:
- GoogleCloudTranslation: Google Cloud Translation API v3.
"""

from core.trans.engines.trans_google_cloud import GoogleCloudTranslation

__all__: list[str] = ["GoogleCloudTranslation"]
