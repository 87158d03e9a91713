import logging

from flask import Flask, request, abort, jsonify
from linebot.v3 import WebhookHandler
from linebot.v3.exceptions import InvalidSignatureError
from linebot.v3.messaging import (
    ApiClient,
    Configuration,
    ImageMessage,
    MessagingApi,
    ReplyMessageRequest,
    TextMessage,
)
from linebot.v3.webhooks import MessageEvent, TextMessageContent

import config
from chat import ChatError, GroqChat
from fun_apis import FunApiError, get_cat_url, get_dog_url, get_joke
from usage_counter import FileStore, QuotaExceeded, UsageTracker

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")


def usage_text(tracker, limit):
    return f"Groq uses today: {tracker.format_usage(limit)}"


def build_reply(text, tracker, chat):
    """Map one incoming text message to the LINE messages sent back."""
    command = text.strip().lower()

    if command == "usage":
        return [TextMessage(text=usage_text(tracker, chat.daily_limit))]

    try:
        if command == "joke":
            return [TextMessage(text=get_joke())]
        if command in ("cat", "dog"):
            url = get_cat_url() if command == "cat" else get_dog_url()
            return [ImageMessage(original_content_url=url, preview_image_url=url)]

        answer = chat.ask(text.strip())
    except (QuotaExceeded, ChatError, FunApiError) as e:
        return [TextMessage(text=str(e))]

    return [
        TextMessage(text=answer),
        TextMessage(text=usage_text(tracker, chat.daily_limit)),
    ]


def create_app(tracker=None, chat=None, channel_secret=None, access_token=None):
    # Flaskアプリ
    app = Flask(__name__)

    tracker = tracker or UsageTracker(FileStore(config.USAGE_DIR), key=config.USAGE_KEY)
    chat = chat or GroqChat(tracker)
    limit = chat.daily_limit

    # LINEの設定
    line_configuration = Configuration(access_token=access_token or config.LINE_CHANNEL_ACCESS_TOKEN or "")
    handler = WebhookHandler(channel_secret or config.LINE_CHANNEL_SECRET or "")

    @app.route("/callback", methods=["POST"])
    def callback():
        signature = request.headers.get("X-Line-Signature", "")
        body = request.get_data(as_text=True)

        try:
            handler.handle(body, signature)
        except InvalidSignatureError:
            app.logger.warning("Invalid LINE signature")
            abort(400)

        return "OK"

    @handler.add(MessageEvent, message=TextMessageContent)
    def handle_text_message(event):
        text = event.message.text or ""
        if not text.strip():
            return

        messages = build_reply(text, tracker, chat)
        with ApiClient(line_configuration) as api_client:
            MessagingApi(api_client).reply_message(
                ReplyMessageRequest(reply_token=event.reply_token, messages=messages)
            )

    # デモページ用のJSON API
    @app.route("/usage", methods=["GET"])
    def usage():
        record = tracker.get_usage()
        return jsonify(
            date=record.date,
            count=record.count,
            limit=limit,
            remaining=record.remaining(limit),
            display=record.display(limit),
        )

    @app.route("/chat", methods=["POST"])
    def chat_endpoint():
        payload = request.get_json(silent=True)
        prompt = payload.get("prompt") if isinstance(payload, dict) else None
        if not isinstance(prompt, str) or not prompt.strip():
            return jsonify(error="prompt is required"), 400

        try:
            answer = chat.ask(prompt.strip())
        except QuotaExceeded as e:
            return jsonify(error=str(e)), 429
        except ChatError as e:
            app.logger.warning("Chat failed: %s", e)
            return jsonify(error=str(e)), 502

        return jsonify(answer=answer, usage=tracker.format_usage(limit))

    @app.route("/joke", methods=["GET"])
    def joke():
        try:
            return jsonify(joke=get_joke())
        except FunApiError as e:
            return jsonify(error=str(e)), 502

    @app.route("/cat", methods=["GET"])
    def cat():
        try:
            return jsonify(url=get_cat_url())
        except FunApiError as e:
            return jsonify(error=str(e)), 502

    @app.route("/dog", methods=["GET"])
    def dog():
        try:
            return jsonify(url=get_dog_url())
        except FunApiError as e:
            return jsonify(error=str(e)), 502

    @app.route("/health", methods=["GET"])
    def health():
        return jsonify(status="ok")

    return app


app = create_app()

if __name__ == "__main__":
    for error in config.validate_api_keys():
        app.logger.warning(error)
    app.run(host="0.0.0.0", port=config.PORT)
