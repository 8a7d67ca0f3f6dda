import requests
from requests.adapters import HTTPAdapter
from urllib3.util import Retry

from linkpreview.models.options import LinkPreviewOptions

USER_AGENT = "LinkPreview-Client/1.0"
RETRY_STATUSES = (429, 500, 502, 503, 504)


def build_session(options: LinkPreviewOptions) -> requests.Session:
    """Session with the retry/backoff policy mounted for the API host.

    Once retries are exhausted the last response is handed back, so the
    caller still sees the upstream status and body.
    """
    retry = Retry(
        total=options.max_retries,
        backoff_factor=0.5,
        status_forcelist=RETRY_STATUSES,
        allowed_methods=frozenset({"GET"}),
        raise_on_status=False,
    )
    session = requests.Session()
    session.headers.update({"User-Agent": USER_AGENT})
    adapter = HTTPAdapter(max_retries=retry)
    session.mount("http://", adapter)
    session.mount("https://", adapter)
    return session
