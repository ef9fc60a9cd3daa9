# utils/firebase_service.py - Firebase topic push for the admin dashboard
import firebase_admin
from firebase_admin import credentials, messaging, exceptions
import json
from typing import Optional, Dict, Any
import logging
from config import FIREBASE_SERVICE_ACCOUNT

logger = logging.getLogger(__name__)


class FirebaseService:
    _initialized = False
    _unavailable_logged = False
    _app = None

    @classmethod
    def initialize(cls) -> bool:
        """Initialize Firebase Admin SDK once"""
        if cls._initialized:
            return True

        if not FIREBASE_SERVICE_ACCOUNT:
            if not cls._unavailable_logged:
                logger.warning("FIREBASE_SERVICE_ACCOUNT not set, admin push notifications disabled")
                cls._unavailable_logged = True
            return False

        try:
            service_account_info = json.loads(FIREBASE_SERVICE_ACCOUNT)

            # Validate required fields
            required_fields = ['type', 'project_id', 'private_key', 'client_email']
            missing = [f for f in required_fields if f not in service_account_info]
            if missing:
                logger.error(f"Missing required fields in service account: {missing}")
                return False

            cred = credentials.Certificate(service_account_info)
            cls._app = firebase_admin.initialize_app(cred)
            cls._initialized = True

            logger.info(f"Firebase initialized successfully for project: {service_account_info.get('project_id')}")
            return True

        except json.JSONDecodeError as e:
            logger.error(f"Error parsing Firebase service account JSON: {e}")
            return False
        except Exception as e:
            logger.error(f"Error initializing Firebase: {e}")
            return False

    @classmethod
    def is_initialized(cls) -> bool:
        return cls._initialized

    @classmethod
    async def send_to_topic(
        cls,
        topic: str,
        title: str,
        body: str,
        data: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        """Send a notification to every device subscribed to the topic"""
        if not cls.initialize():
            return {"success": False, "error": "Firebase not initialized"}

        try:
            # FCM requires string values
            notification_data = {}
            if data:
                notification_data = {k: str(v) for k, v in data.items() if v is not None}

            message = messaging.Message(
                notification=messaging.Notification(title=title, body=body),
                data=notification_data,
                topic=topic,
                webpush=messaging.WebpushConfig(
                    notification=messaging.WebpushNotification(
                        title=title,
                        body=body,
                        icon="/icon-192x192.png"
                    ),
                    fcm_options=messaging.WebpushFCMOptions(link="/admin")
                )
            )

            response = messaging.send(message)
            logger.info(f"Notification sent to topic {topic}: {response}")
            return {"success": True, "response": response}

        except exceptions.InvalidArgumentError as e:
            logger.error(f"Invalid argument: {e}")
            return {"success": False, "error": "invalid_argument"}
        except Exception as e:
            logger.error(f"Unexpected error sending notification: {e}")
            return {"success": False, "error": str(e)}
