"""SwimTimes: swim time tracking with athlete identity resolution."""
