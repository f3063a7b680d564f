"""GoalTrio - three goals per day, week and month."""
