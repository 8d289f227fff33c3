"""Common literal values used across autospoof.

These constants keep output folder names, OAuth endpoints, and placeholder
values centralized so the builder, binder, and tests can import the same
values without drifting. Intended for internal use within the autospoof
package.

Examples
--------
>>> from autospoof import _constants
>>> _constants.ARTICLE_FILENAME_TEMPLATE.format(slug="breaking-news-")
'breaking-news-.html'
"""

INDEX_FILENAME = "index.html"
ARTICLES_DIRNAME = "articles"
IMAGES_DIRNAME = "images"
ARTICLE_FILENAME_TEMPLATE = "{slug}.html"

FALLBACK_AUTHOR = "Staff Reporter"

GOOGLE_DOC_MIME_TYPE = "application/vnd.google-apps.document"
DRIVE_FILES_URL = "https://www.googleapis.com/drive/v3/files"
DOCS_DOCUMENT_URL = "https://docs.googleapis.com/v1/documents/{document_id}"
DRIVE_PAGE_SIZE = 1000

OAUTH_AUTHORIZE_URL = "https://accounts.google.com/o/oauth2/auth"
OAUTH_TOKEN_URL = "https://oauth2.googleapis.com/token"  # noqa: S105 - endpoint
DRIVE_READONLY_SCOPE = "https://www.googleapis.com/auth/drive.readonly"

USER_AGENT = "autospoof/0.1"
REQUEST_TIMEOUT = 30.0
