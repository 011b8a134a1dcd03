"""Starter catalog of free video courses used to populate an empty database."""

from typing import Any, Dict, List


def _youtube(video_id: str, channel: str) -> Dict[str, str]:
    return {
        "youtube_video_id": video_id,
        "youtube_channel_name": channel,
        "youtube_video_url": f"https://www.youtube.com/watch?v={video_id}",
        "thumbnail_url": f"https://img.youtube.com/vi/{video_id}/maxresdefault.jpg",
    }


STARTER_COURSES: List[Dict[str, Any]] = [
    {
        "title": "Complete React Tutorial for Beginners",
        "description": "Learn React from scratch with this comprehensive tutorial. "
        "Perfect for beginners who want to build modern web applications.",
        "level": "beginner",
        "duration": "3h 45m",
        "category": "frontend",
        "enrolled": 15420,
        **_youtube("DLX62G4lc44", "freeCodeCamp.org"),
    },
    {
        "title": "Node.js & Express Backend Development",
        "description": "Master backend development with Node.js and Express. "
        "Build RESTful APIs and learn server-side programming.",
        "level": "intermediate",
        "duration": "4h 20m",
        "category": "backend",
        "enrolled": 8750,
        **_youtube("fBNz5xF-Kx4", "Programming with Mosh"),
    },
    {
        "title": "Full Stack MERN App Development",
        "description": "Build a complete full-stack application using MongoDB, Express, "
        "React, and Node.js. Deploy to production.",
        "level": "advanced",
        "duration": "6h 15m",
        "category": "fullstack",
        "enrolled": 12340,
        **_youtube("ngc9gnuJeEY", "Traversy Media"),
    },
    {
        "title": "Machine Learning with Python",
        "description": "Introduction to machine learning using Python. Learn algorithms, "
        "data preprocessing, and model evaluation.",
        "level": "intermediate",
        "duration": "5h 30m",
        "category": "ai",
        "enrolled": 9680,
        **_youtube("7eh4d6sabA0", "Python Engineer"),
    },
    {
        "title": "Blockchain Development Tutorial",
        "description": "Learn blockchain development from basics to advanced. "
        "Build your first cryptocurrency and smart contracts.",
        "level": "advanced",
        "duration": "4h 50m",
        "category": "blockchain",
        "enrolled": 6420,
        **_youtube("M576WGiDBdQ", "Dapp University"),
    },
    {
        "title": "Advanced JavaScript Concepts",
        "description": "Deep dive into advanced JavaScript concepts including closures, "
        "prototypes, async programming, and more.",
        "level": "advanced",
        "duration": "3h 25m",
        "category": "frontend",
        "enrolled": 11250,
        **_youtube("Mus_vwhTCq0", "JavaScript Mastery"),
    },
    {
        "title": "Python Django REST Framework",
        "description": "Build powerful REST APIs with Django REST Framework. "
        "Perfect for backend developers.",
        "level": "intermediate",
        "duration": "4h 10m",
        "category": "backend",
        "enrolled": 7890,
        **_youtube("c708Nf0cHrs", "Very Academy"),
    },
    {
        "title": "AI Chatbot Development",
        "description": "Create intelligent chatbots using natural language processing "
        "and machine learning techniques.",
        "level": "advanced",
        "duration": "3h 40m",
        "category": "ai",
        "enrolled": 5640,
        **_youtube("RuVac3VdNYE", "Tech With Tim"),
    },
]
