# utils/notifications.py - Simulated WhatsApp and email customer notifications
import asyncio
import logging
import time
from typing import Dict, Any
from config import NOTIFICATION_DELAY_SECONDS
from models.notifications import NotificationData, NotificationKind
from services.catalog import format_rupiah

logger = logging.getLogger(__name__)

SIGNATURE = "Cat Grooming Service"

EMAIL_SUBJECTS = {
    NotificationKind.NEW_BOOKING: f"New Booking - {SIGNATURE}",
    NotificationKind.CONFIRMED: f"Booking Confirmed - {SIGNATURE}",
    NotificationKind.COMPLETED: f"Service Completed - {SIGNATURE}",
    NotificationKind.REMINDER: f"Schedule Reminder - {SIGNATURE}",
}


def build_whatsapp_message(data: NotificationData, kind: NotificationKind) -> str:
    if kind == NotificationKind.NEW_BOOKING:
        return (
            f"🐱 *New Cat Grooming Booking!*\n\n"
            f"Hi {data.name},\n\n"
            f"Thank you for booking with us! Here are your booking details:\n\n"
            f"📋 *Booking Details:*\n"
            f"• ID: #{data.short_id}\n"
            f"• Service: {data.service_name}\n"
            f"• Date: {data.date}\n"
            f"• Time: {data.time}\n"
            f"• Address: {data.address}\n"
            f"• Total: {format_rupiah(data.total_price)}\n"
            f"• Status: Waiting for admin confirmation\n\n"
            f"📞 Our admin will contact you shortly to confirm.\n\n"
            f"Thank you,\n{SIGNATURE}"
        )
    if kind == NotificationKind.CONFIRMED:
        return (
            f"✅ *Booking Confirmed!*\n\n"
            f"Hi {data.name},\n\n"
            f"Your booking is CONFIRMED! Our groomer will arrive as scheduled:\n\n"
            f"📅 *Schedule:*\n"
            f"• Date: {data.date}\n"
            f"• Time: {data.time}\n"
            f"• Address: {data.address}\n\n"
            f"📞 The groomer will call you 1 hour before arriving.\n\n"
            f"Thank you,\n{SIGNATURE}"
        )
    if kind == NotificationKind.COMPLETED:
        return (
            f"🎉 *Service Completed!*\n\n"
            f"Hi {data.name},\n\n"
            f"Thank you for using our service! We hope your cat is happy and healthy 🐱\n\n"
            f"📋 *Service Details:*\n"
            f"• ID: #{data.short_id}\n"
            f"• Service: {data.service_name}\n"
            f"• Status: Completed\n\n"
            f"💡 Please leave us a rating on our website!\n\n"
            f"Thank you,\n{SIGNATURE}"
        )
    return (
        f"⏰ *Schedule Reminder*\n\n"
        f"Hi {data.name},\n\n"
        f"This is a reminder for your grooming appointment:\n\n"
        f"📅 *Schedule:*\n"
        f"• Date: {data.date}\n"
        f"• Time: {data.time}\n"
        f"• Service: {data.service_name}\n"
        f"• Address: {data.address}\n\n"
        f"Please have your cat ready!\n\n"
        f"Thank you,\n{SIGNATURE}"
    )


class NotificationService:
    @staticmethod
    async def send_whatsapp_notification(data: NotificationData, kind: NotificationKind) -> Dict[str, Any]:
        """Simulate a WhatsApp message to the customer"""
        message = build_whatsapp_message(data, kind)
        logger.info(f"📱 WhatsApp notification to {data.phone}:\n{message}")

        if NOTIFICATION_DELAY_SECONDS:
            await asyncio.sleep(NOTIFICATION_DELAY_SECONDS)

        return {
            "success": True,
            "message_id": f"WA_{int(time.time() * 1000)}",
            "type": "whatsapp",
            "recipient": data.phone
        }

    @staticmethod
    async def send_email_notification(data: NotificationData, kind: NotificationKind) -> Dict[str, Any]:
        """Simulate an email record for the booking"""
        recipient = f"{data.phone}@example.com"
        logger.info(
            f"📧 Email notification to {recipient}: "
            f"subject={EMAIL_SUBJECTS[kind]!r} booking=#{data.short_id}"
        )

        if NOTIFICATION_DELAY_SECONDS:
            await asyncio.sleep(NOTIFICATION_DELAY_SECONDS * 1.5)

        return {
            "success": True,
            "message_id": f"EMAIL_{int(time.time() * 1000)}",
            "type": "email",
            "recipient": recipient
        }

    @staticmethod
    async def send_notification(data: NotificationData, kind) -> Dict[str, Any]:
        """Send over both channels; a failing channel is logged, never raised"""
        kind = NotificationKind(kind)
        results = await asyncio.gather(
            NotificationService.send_whatsapp_notification(data, kind),
            NotificationService.send_email_notification(data, kind),
            return_exceptions=True
        )

        response = {"success": True, "kind": kind.value}
        for channel, result in zip(("whatsapp", "email"), results):
            if isinstance(result, Exception):
                logger.error(
                    f"❌ {channel} notification '{kind.value}' failed for booking {data.booking_id}: {result}"
                )
                response["success"] = False
                response[channel] = {"success": False, "error": str(result)}
            else:
                response[channel] = result
        return response
