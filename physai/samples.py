"""Sample problems offered by the problem picker."""

SAMPLE_PROBLEMS: tuple[str, ...] = (
    "A ball is thrown vertically upward with a velocity of 25 m/s. What is the maximum height?",
    "A projectile is launched at 45 degrees with initial velocity of 30 m/s. Find the range.",
    "A simple pendulum of length 2m swings with small amplitude. Find its period.",
    "A lens with focal length 15cm forms an image. Find the image position if object is at 30cm.",
)
