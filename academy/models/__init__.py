from academy.models.participant import Participant
from academy.models.leaderboard import LeaderboardEntry
from academy.models.participant_mastery import ParticipantMastery
from academy.models.admin_user import AdminUser
from academy.models.submission import Submission
from academy.models.peer_review import PeerReview
from academy.models.participant_achievement import ParticipantAchievement
from academy.models.task_force_member import TaskForceMember
from academy.models.participant_recognition import ParticipantRecognition
from academy.models.activity_log import ActivityLog
from academy.models.comment import Comment
