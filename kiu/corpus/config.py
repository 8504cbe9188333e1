"""Chat export layout — container labels and page naming."""

# div class labels
TEXT_LABEL = 'text'            # message body
AUTHOR_LABEL = 'from_name'     # sender display name
DATE_CLASS = 'date'            # one of the classes on the timestamp div, text is HH:MM

CONTAINER_TAG = 'div'


def page_name(page):
    """Archive member holding the given 1-based page."""
    if page == 1:
        return 'messages.html'
    return f'messages{page}.html'
