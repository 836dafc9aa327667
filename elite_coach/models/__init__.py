from elite_coach.models.profile import Profile, RoleEnum
from elite_coach.models.workout import Workout, Exercise
from elite_coach.models.booking import Booking, BookingStatus, AvailableSlot
from elite_coach.models.progress import Progress
from elite_coach.models.engagement import UserEngagement
from elite_coach.models.broadcast import Broadcast
from elite_coach.models.contact import ContactMessage
from elite_coach.models.attachment import Attachment

__all__ = [
    "Profile", "RoleEnum",
    "Workout", "Exercise",
    "Booking", "BookingStatus", "AvailableSlot",
    "Progress",
    "UserEngagement",
    "Broadcast",
    "ContactMessage",
    "Attachment",
]
