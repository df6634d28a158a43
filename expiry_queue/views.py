"""API views for the expiry_queue application."""

import structlog
from django.conf import settings
from pydantic import ValidationError
from rest_framework import status
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from expiry_queue.auth import ServiceTokenAuthentication, TelegramSecretAuthentication
from expiry_queue.schemas import PopulateQueueRequest, SendMessageRequest
from expiry_queue.services import (
    TelegramChannel,
    health_service,
    queue_cleanup_service,
    queue_populator_service,
    queue_processor_service,
    queue_stats_service,
)

logger = structlog.get_logger(__name__)


def _get_client_ip(request) -> str:
    """Extract the client IP address the send budget is keyed on.

    X-Forwarded-For is only read when TRUSTED_PROXY_COUNT proxies sit in
    front of the service. Each of them appends one hop, so the entry that
    many places from the right is the address the outermost trusted proxy
    saw. Anything further left is client supplied and ignored.
    """
    remote_addr = str(request.META.get("REMOTE_ADDR", "unknown"))
    trusted_proxies = getattr(settings, "TRUSTED_PROXY_COUNT", 0)
    if trusted_proxies <= 0:
        return remote_addr

    hops = [
        hop.strip()
        for hop in request.headers.get("x-forwarded-for", "").split(",")
        if hop.strip()
    ]
    if not hops:
        return remote_addr
    return hops[-min(trusted_proxies, len(hops))]


def _job_status(success: bool) -> int:
    return status.HTTP_200_OK if success else status.HTTP_500_INTERNAL_SERVER_ERROR


class LivenessCheckView(APIView):
    """Liveness check endpoint.

    Returns 200 if the service is alive and running.
    This should not check external dependencies.

    This endpoint is exempt from authentication for orchestrator health checks.
    """

    def __init__(self, **kwargs):
        """Initialize view with authentication exemptions.

        Args:
            **kwargs: Keyword arguments passed to parent class
        """
        super().__init__(**kwargs)
        self.authentication_classes = []
        self.permission_classes = [AllowAny]

    def get(self, _request):
        """Handle GET request for liveness check."""
        liveness = health_service.get_liveness_status()
        return Response(liveness.model_dump(), status=status.HTTP_200_OK)


class ReadinessCheckView(APIView):
    """Readiness check endpoint.

    Returns 200 when the database is reachable, including the degraded case
    where only the cache is down. Returns 503 when the database is down,
    since no queue job can run without it.

    This endpoint is exempt from authentication for orchestrator health checks.
    """

    def __init__(self, **kwargs):
        """Initialize view with authentication exemptions.

        Args:
            **kwargs: Keyword arguments passed to parent class
        """
        super().__init__(**kwargs)
        self.authentication_classes = []
        self.permission_classes = [AllowAny]

    def get(self, _request):
        """Handle GET request for readiness check."""
        readiness = health_service.get_readiness_status()
        return Response(
            readiness.model_dump(),
            status=(
                status.HTTP_200_OK
                if readiness.ready
                else status.HTTP_503_SERVICE_UNAVAILABLE
            ),
        )


class PopulateQueueView(APIView):
    """Trigger endpoint for the populate job.

    Stages pending reminders for every item expiring between today and the
    horizon. Called periodically by the scheduler.
    """

    authentication_classes = (ServiceTokenAuthentication,)
    permission_classes = (IsAuthenticated,)

    def post(self, request):
        """Handle POST request to populate the queue.

        Args:
            request: HTTP request object, optionally with ``days_ahead``

        Returns:
            200 OK with PopulateQueueResponse on full or partial success
            400 Bad Request if days_ahead is invalid
            401 Unauthorized if the service token is missing or wrong
            500 Internal Server Error if every offset failed or the job is
                not configured
        """
        logger.info("Populate queue request received")

        try:
            populate_request = PopulateQueueRequest.model_validate(request.data or {})
        except ValidationError as e:
            logger.warning(
                "Invalid request body for populate queue",
                validation_errors=e.errors(include_context=False),
            )
            return Response(
                {
                    "success": False,
                    "error": "bad_request",
                    "message": "Invalid request parameters",
                    "errors": e.errors(include_context=False),
                },
                status=status.HTTP_400_BAD_REQUEST,
            )

        result = queue_populator_service.populate_queue(
            days_ahead=populate_request.days_ahead
        )
        return Response(result.model_dump(), status=_job_status(result.success))


class ProcessQueueView(APIView):
    """Trigger endpoint for the process job.

    Sends pending reminders in priority order through the Telegram channel.
    """

    authentication_classes = (ServiceTokenAuthentication,)
    permission_classes = (IsAuthenticated,)

    def post(self, _request):
        """Handle POST request to drain the queue.

        Returns:
            200 OK with ProcessQueueResponse (including per-row failures)
            401 Unauthorized if the service token is missing or wrong
            500 Internal Server Error if pending rows could not be fetched or
                the channel is not configured
        """
        logger.info("Process queue request received")
        result = queue_processor_service.process_queue()
        return Response(result.model_dump(), status=_job_status(result.success))


class CleanupQueueView(APIView):
    """Trigger endpoint for the retention cleanup job."""

    authentication_classes = (ServiceTokenAuthentication,)
    permission_classes = (IsAuthenticated,)

    def post(self, _request):
        """Handle POST request to delete queue rows past retention."""
        logger.info("Cleanup queue request received")
        result = queue_cleanup_service.cleanup()
        return Response(result.model_dump(), status=status.HTTP_200_OK)


class QueueStatsView(APIView):
    """Queue size broken down by status."""

    authentication_classes = (ServiceTokenAuthentication,)
    permission_classes = (IsAuthenticated,)

    def get(self, _request):
        stats = queue_stats_service.get_queue_stats()
        return Response(stats.model_dump(), status=status.HTTP_200_OK)


class TelegramSendView(APIView):
    """Relay a message to a chat through the outbound channel.

    Accepts either the send secret header or the service bearer token.
    Every caller IP has its own request budget.
    """

    authentication_classes = (TelegramSecretAuthentication, ServiceTokenAuthentication)
    permission_classes = (IsAuthenticated,)

    def post(self, request):
        """Handle POST request to send a Telegram message.

        Args:
            request: HTTP request object containing chat_id and text

        Returns:
            200 OK with ``{ok: true, result}`` if Telegram accepted it
            400 Bad Request if validation fails
            401 Unauthorized if no valid secret was presented
            429 Too Many Requests if the caller's budget is exhausted
            502 Bad Gateway if Telegram rejected or could not be reached
        """
        try:
            send_request = SendMessageRequest.model_validate(request.data)
        except ValidationError as e:
            logger.warning(
                "Invalid request body for telegram send",
                validation_errors=e.errors(include_context=False),
            )
            return Response(
                {
                    "ok": False,
                    "error": "chat_id and text are required",
                    "errors": e.errors(include_context=False),
                },
                status=status.HTTP_400_BAD_REQUEST,
            )

        client_ip = _get_client_ip(request)
        logger.info(
            "Telegram send request received",
            chat_id=send_request.chat_id,
            source=send_request.source,
            client_ip=client_ip,
        )

        channel = TelegramChannel()
        result = channel.send_message(
            send_request.chat_id,
            send_request.text,
            parse_mode=send_request.parse_mode,
            caller=f"ip:{client_ip}",
            disable_web_page_preview=send_request.disable_web_page_preview,
            disable_notification=send_request.disable_notification,
            reply_to_message_id=send_request.reply_to_message_id,
        )

        if result.success:
            return Response(
                {"ok": True, "result": {"message_id": result.message_id}},
                status=status.HTTP_200_OK,
            )

        if result.rate_limited:
            return Response(
                {
                    "ok": False,
                    "error": result.error,
                    "retry_after": result.retry_after,
                },
                status=status.HTTP_429_TOO_MANY_REQUESTS,
                headers={"Retry-After": str(result.retry_after or 1)},
            )

        return Response(
            {"ok": False, "error": result.error},
            status=status.HTTP_502_BAD_GATEWAY,
        )
