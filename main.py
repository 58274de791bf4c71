"""
Gesture Practice - learn sign language gestures in front of a webcam.

Entry point for the application.
"""
import argparse
import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent / "src"))


def parse_args():
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Gesture Practice - step-by-step gesture learning",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    
    parser.add_argument(
        "--gesture",
        default="hello",
        help="Id of the gesture to practice (default: hello)",
    )
    
    parser.add_argument(
        "--list",
        action="store_true",
        help="List available gestures and exit",
    )
    
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to config file (default: config.yaml)",
    )
    
    parser.add_argument(
        "--device",
        type=int,
        default=None,
        help="Camera device index (overrides config)",
    )
    
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Print every detection tick",
    )
    
    return parser.parse_args()


def list_gestures(catalog):
    """Print the catalog as a table."""
    for gesture in catalog:
        lock = " " if gesture.unlocked else "*"
        print(f"{lock} {gesture.id:<12} {gesture.name:<12} "
              f"{gesture.difficulty.value:<7} {gesture.category:<10} {gesture.points:>3} pts")
    print("\n* locked")
    return 0


def run_practice(config, gesture, debug=False):
    """Run one practice session against the webcam."""
    import signal
    import atexit
    from PyQt5.QtCore import QCoreApplication
    from practice import PracticeSession
    
    app = QCoreApplication(sys.argv)
    session = PracticeSession.from_config(gesture, config)
    
    def cleanup():
        """Ensure camera is released on exit."""
        print("\nCleaning up camera resources...")
        session.close()
        print("Cleanup complete.")
    
    atexit.register(cleanup)
    
    def signal_handler(signum, frame):
        """Handle Ctrl+C and kill signals gracefully."""
        print(f"\nReceived signal {signum}, shutting down...")
        app.quit()
    
    signal.signal(signal.SIGINT, signal_handler)
    signal.signal(signal.SIGTERM, signal_handler)
    
    def handle_progress(progress):
        if debug or progress >= 100:
            print(f"  Detection progress: {progress}%")
    
    def handle_completed(event):
        print(f"\nExcellent Work! You've performed \"{gesture.name}\" "
              f"(+{event.points_awarded} points)")
        app.quit()
    
    session.camera_error.connect(lambda msg: print(f"CAMERA ERROR: {msg}"))
    session.detection_failed.connect(lambda msg: print(f"DETECTION ERROR: {msg}"))
    session.progress_changed.connect(handle_progress)
    session.session_completed.connect(handle_completed)
    
    print(f"Learning: {gesture.name} ({gesture.difficulty.value})")
    print(f"  {gesture.description}")
    for i, instruction in enumerate(gesture.instructions):
        print(f"  {i + 1}. {instruction}")
    if gesture.key_points:
        print(f"  Key points: {', '.join(gesture.key_points)}")
    print()
    
    try:
        print("Starting camera...")
        if not session.start_camera():
            return 1
        
        print("Analyzing your gesture...")
        session.start_detection()
        result = app.exec_()
    finally:
        cleanup()
        atexit.unregister(cleanup)  # Avoid double cleanup
    
    return result if session.completed else 1


def main():
    """Main entry point."""
    args = parse_args()
    
    from practice import load_config
    from catalog import load_catalog
    config = load_config(args.config)
    catalog = load_catalog(config.catalog.path)
    
    if args.list:
        return list_gestures(catalog)
    
    # Apply CLI overrides
    if args.device is not None:
        config.camera.device_id = args.device
    
    if args.gesture not in catalog:
        print(f"ERROR: Unknown gesture '{args.gesture}'. Use --list to see options.")
        return 2
    
    gesture = catalog.get(args.gesture)
    if not gesture.unlocked:
        print(f"ERROR: Gesture '{gesture.id}' is locked. Complete earlier gestures first.")
        return 2
    
    return run_practice(config, gesture, debug=args.debug)


if __name__ == "__main__":
    sys.exit(main())
