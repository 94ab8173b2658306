# schemas/_choices.py
"""Fixed option lists shared by several resource forms."""

DAYS = ("Saturday", "Sunday", "Monday", "Tuesday", "Wednesday", "Thursday")
PERIODS = tuple(
    f"{n}{suffix} Period"
    for n, suffix in zip(range(1, 9), ("st", "nd", "rd", "th", "th", "th", "th", "th"))
)
STUDENT_GENDERS = ("male", "female", "other")
TEACHER_GENDERS = ("Male", "Female", "Other")
GROUPS = ("Science", "Commerce", "Arts")
RELIGIONS = ("Islam", "Hinduism", "Christianity", "Buddhism", "Other")
PRIORITIES = ("low", "medium", "high")

# option_key values resolved at render time from other resources
CLASS_NAMES = "class_names"
SECTION_NAMES = "section_names"
EXAM_NAMES = "exam_names"
