import json
import logging
from datetime import datetime, timezone

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from ..core.settings import settings

logger = logging.getLogger(__name__)

_SNS = None


def get_client():
    """SNS client for the configured region, built on first publish."""
    global _SNS
    if _SNS is None:
        _SNS = boto3.client("sns", region_name=settings.AWS_REGION, endpoint_url=settings.SNS_ENDPOINT_URL)
    return _SNS


def publish_event(event_type: str, payload: dict) -> bool:
    """
    Publish a domain event to the central topic with an event_type attribute.
    Returns False when publishing is disabled or failed; never raises.
    """
    if not settings.SNS_TOPIC_EVENTS_ARN:
        logger.debug("SNS topic not configured, dropping %s", event_type)
        return False

    envelope = {
        "event_type": event_type,
        "ts": datetime.now(timezone.utc).isoformat(),
        "payload": payload,
    }
    try:
        get_client().publish(
            TopicArn=settings.SNS_TOPIC_EVENTS_ARN,
            Message=json.dumps(envelope, default=str),
            MessageAttributes={
                "event_type": {"DataType": "String", "StringValue": event_type}
            },
            Subject=f"FlashFit event: {event_type}",
        )
    except (BotoCoreError, ClientError) as e:
        logger.warning("Publishing %s failed: %s", event_type, e)
        return False
    return True
