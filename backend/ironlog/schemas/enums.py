from enum import Enum

class SetType(str, Enum):
    warmup = "warmup"
    approach = "approach"
    effective = "effective"

class EquipmentType(str, Enum):
    barbell = "barbell"
    dumbbell = "dumbbell"
    machine = "machine"
    cable = "cable"
    bodyweight = "bodyweight"
    kettlebell = "kettlebell"
    other = "other"

class BarbellVariant(str, Enum):
    olympic = "olympic"
    womens = "womens"
    ez = "ez"
    technique = "technique"
    custom = "custom"

# Own weight of each bar in kg; custom bars carry their weight explicitly
BARBELL_WEIGHTS = {
    BarbellVariant.olympic: 20.0,
    BarbellVariant.womens: 15.0,
    BarbellVariant.ez: 10.0,
    BarbellVariant.technique: 7.5,
}

class SessionMode(str, Enum):
    live = "live"
    plan = "plan"

class SessionState(str, Enum):
    idle = "idle"
    configuring = "configuring"
    exercise_preview = "exercise_preview"
    set_running = "set_running"
    resting = "resting"
    workout_complete = "workout_complete"

class PauseDomain(str, Enum):
    workout = "workout"
    set = "set"
    rest = "rest"

class PlanRestPolicy(str, Enum):
    # plan-mode sets go straight to the next set, no rest interval is logged
    bypass = "bypass"
    # plan-mode sets pass through a zero-length rest that is logged
    record = "record"
