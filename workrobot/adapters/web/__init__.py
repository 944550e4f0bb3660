"""HTTP relay in front of the robot client."""
