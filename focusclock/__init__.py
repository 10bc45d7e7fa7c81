"""Focus Clock - GNOME panel clock focus label and inactivity lock"""

__version__ = "2.0.0"
