"""
Built-in British Sign Language starter gestures.
"""
from pathlib import Path
from typing import Optional
import yaml

from .gestures import Difficulty, Gesture, GestureCatalog


SAMPLE_GESTURES = [
    Gesture(
        id="hello",
        name="Hello",
        description="A friendly greeting gesture",
        difficulty=Difficulty.EASY,
        category="Greetings",
        image_url="https://images.unsplash.com/photo-1559027615-cd4628902d4a?w=400&h=300&fit=crop",
        instructions=(
            "Raise your dominant hand to shoulder height",
            "Keep your palm facing outward",
            "Wave gently from side to side",
        ),
        key_points=("Open palm", "Shoulder height", "Gentle wave motion"),
        unlocked=True,
        points=10,
    ),
    Gesture(
        id="thank-you",
        name="Thank You",
        description="Express gratitude with this gesture",
        difficulty=Difficulty.EASY,
        category="Greetings",
        image_url="https://images.unsplash.com/photo-1582213782179-e0d53f98f2ca?w=400&h=300&fit=crop",
        instructions=(
            "Place your fingertips on your chin",
            "Move your hand forward and down",
            "End with palm facing up",
        ),
        key_points=("Start at chin", "Forward motion", "Palm up finish"),
        unlocked=True,
        points=10,
    ),
    Gesture(
        id="please",
        name="Please",
        description="A polite request gesture",
        difficulty=Difficulty.EASY,
        category="Greetings",
        image_url="https://images.unsplash.com/photo-1573496359142-b8d87734a5a2?w=400&h=300&fit=crop",
        instructions=(
            "Place your flat hand on your chest",
            "Make small circular motions",
            "Keep your palm against your chest",
        ),
        key_points=("Flat hand", "Chest placement", "Circular motion"),
        unlocked=True,
        points=10,
    ),
    Gesture(
        id="yes",
        name="Yes",
        description="Affirmative response gesture",
        difficulty=Difficulty.MEDIUM,
        category="Responses",
        image_url="https://images.unsplash.com/photo-1571019613454-1cb2f99b2d8b?w=400&h=300&fit=crop",
        instructions=(
            "Make a fist with your dominant hand",
            "Nod your fist up and down",
            "Keep the motion clear and deliberate",
        ),
        key_points=("Closed fist", "Nodding motion", "Clear movement"),
        points=15,
    ),
    Gesture(
        id="no",
        name="No",
        description="Negative response gesture",
        difficulty=Difficulty.MEDIUM,
        category="Responses",
        image_url="https://images.unsplash.com/photo-1594736797933-d0401ba2fe65?w=400&h=300&fit=crop",
        instructions=(
            "Extend your index and middle fingers",
            "Tap them against your thumb",
            "Repeat the tapping motion",
        ),
        key_points=("Two fingers extended", "Thumb contact", "Tapping rhythm"),
        points=15,
    ),
    Gesture(
        id="love",
        name="Love",
        description="Express affection with this gesture",
        difficulty=Difficulty.HARD,
        category="Emotions",
        image_url="https://images.unsplash.com/photo-1518199266791-5375a83190b7?w=400&h=300&fit=crop",
        instructions=(
            "Cross both arms over your chest",
            "Hug yourself gently",
            "Show a warm expression",
        ),
        key_points=("Crossed arms", "Self-hug", "Warm expression"),
        points=25,
    ),
]


def default_catalog() -> GestureCatalog:
    return GestureCatalog(list(SAMPLE_GESTURES))


def load_catalog(catalog_path: Optional[Path] = None) -> GestureCatalog:
    """
    Load gestures from a YAML file.
    
    Args:
        catalog_path: File with a top-level 'gestures' list. If None or
                     missing, the built-in samples are used.
    
    Returns:
        GestureCatalog keyed by gesture id.
    """
    if catalog_path is None:
        return default_catalog()
    
    catalog_path = Path(catalog_path)
    if not catalog_path.exists():
        return default_catalog()
    
    with open(catalog_path, 'r') as f:
        data = yaml.safe_load(f) or {}
    
    return GestureCatalog([Gesture.from_dict(d) for d in data.get('gestures', [])])
