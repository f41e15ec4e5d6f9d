from app.api.users.models import Users
from app.api.events.models import EventCategories, Events
from app.api.events.volunteer.models import EventVolunteers
from app.api.events.attendance.models import EventAttendances
from app.api.interests.models import EventInterests
from app.api.notifications.models import Notifications
from app.api.tasks.models import TaskAssignments, Tasks
from app.api.comments.models import CommentRatings
