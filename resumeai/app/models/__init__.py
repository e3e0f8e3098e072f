from resumeai.app.models.user import User
from resumeai.app.models.resume import Resume, ResumeStatus
