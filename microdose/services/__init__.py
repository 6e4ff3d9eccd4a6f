from .planner import PlanningError, ProtocolPlan, calculate_dose, create_protocol_plan
from .reminders import NotificationSettings, ReminderSetting, Reminder, plan_reminders
