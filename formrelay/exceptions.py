"""
Custom exceptions for Formrelay.
"""


class FieldListError(Exception):
    """Raised when the ActiveCampaign custom field list can't be loaded"""

    pass


class ShopifyAPIError(Exception):
    """Raised when a Shopify GraphQL call fails or returns top level errors"""

    pass


class FileRelayError(Exception):
    """Raised when files can't be staged or uploaded to Shopify"""

    pass
