"""
Base Dialog Mixin
Shared result convention for dialogs opened through the DialogService.
"""


class BaseDialog:
    """
    Mixin for dialog classes with common functionality.

    Provides:
    - Consistent result handling via ``get_result()``
    """

    def get_result(self):
        """
        Get the dialog result data.

        Returns:
            The converted result, or None if cancelled
        """
        return None
