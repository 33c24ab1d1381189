"""Intent API resource - set a research intent and run AI annotation."""

import falcon.asgi

from marginalia.application.use_cases.analysis.set_intent import SetIntentUseCase
from marginalia.interfaces.api.serializers import annotation_to_dict, parse_uuid, read_json


class IntentResource:
    """POST /v1/documents/{document_id}/intent."""

    def __init__(self, set_intent: SetIntentUseCase) -> None:
        self._set_intent = set_intent

    async def on_post(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, document_id: str
    ) -> None:
        """Body: {intent, thoroughness?}. Returns the document's annotations after analysis."""
        doc_id = parse_uuid(document_id, "document id")
        body = await read_json(req)
        intent = body.get("intent")
        if not isinstance(intent, str):
            resp.status = falcon.HTTP_400
            resp.media = {"error": "Intent is required"}
            return

        annotations = await self._set_intent.execute(
            doc_id, intent, body.get("thoroughness", "standard")
        )
        resp.media = [annotation_to_dict(a) for a in annotations]
        resp.status = falcon.HTTP_200
