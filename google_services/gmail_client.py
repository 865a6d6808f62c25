from google.oauth2.credentials import Credentials
from googleapiclient.discovery import build

from email_reader.message_parser import parse_gmail_message
from google_services.retry import execute
from models.data_models import Label, Thread
from utils.logger import get_logger

logger = get_logger(__name__)

USER_ID = "me"


class GmailClient:
    """Searches conversations and manages the "already processed" label."""

    def __init__(self, credentials: Credentials):
        self.service = build("gmail", "v1", credentials=credentials)

    def ensure_label(self, name: str) -> Label:
        """Return the user label called `name`, creating it on first use.

        Safe to call on every run.
        """
        response = execute(self.service.users().labels().list(userId=USER_ID))
        for label in response.get("labels", []):
            if label["name"] == name:
                logger.info(f"Gmail label '{name}' found")
                return Label(id=label["id"], name=label["name"])

        created = execute(self.service.users().labels().create(
            userId=USER_ID,
            body={
                "name": name,
                "labelListVisibility": "labelShow",
                "messageListVisibility": "show",
            },
        ))
        logger.info(f"Gmail label '{name}' created")
        return Label(id=created["id"], name=created["name"])

    def search_threads(self, query: str) -> list[Thread]:
        """Return every conversation matching a Gmail search query.

        Each Thread carries its latest message, already parsed.
        """
        thread_ids: list[str] = []
        page_token = None
        while True:
            response = execute(self.service.users().threads().list(
                userId=USER_ID,
                q=query,
                pageToken=page_token,
            ))
            thread_ids.extend(t["id"] for t in response.get("threads", []))
            page_token = response.get("nextPageToken")
            if not page_token:
                break

        return [self.get_thread(thread_id) for thread_id in thread_ids]

    def get_thread(self, thread_id: str) -> Thread:
        response = execute(self.service.users().threads().get(
            userId=USER_ID,
            id=thread_id,
            format="full",
        ))
        # Gmail returns messages oldest first
        latest = response["messages"][-1]
        return Thread(thread_id=thread_id, latest_message=parse_gmail_message(latest))

    def add_label(self, thread: Thread, label: Label) -> None:
        """Attach `label` to every message of the conversation."""
        execute(self.service.users().threads().modify(
            userId=USER_ID,
            id=thread.thread_id,
            body={"addLabelIds": [label.id]},
        ))
        logger.debug(f"Labelled thread {thread.thread_id} with '{label.name}'")
