from dataclasses import dataclass


@dataclass
class AppConfig:
    # --- Logging ---
    log_level: str = "INFO"  # Minimum log level to output
    log_file: str | None = None  # Redirect logs to a file instead of the console

    # --- Window ---
    width: int = 1024  # Initial window width
    height: int = 768  # Initial window height
    title: str = "idleview"  # Window title
    clear_color: tuple = (0.0, 0.0, 0.0, 0.0)  # Background RGBA

    # --- Camera ---
    fov: float = 18.0  # Vertical field of view (degrees)
    near: float = 0.1  # Near clip plane
    far: float = 1000.0  # Far clip plane
    camera_position: tuple = (2.0, 0.0, 0.0)  # Fixed camera position, looks at origin

    # --- Assets ---
    asset_dir: str = "./static/sceneone"  # Shared base path of the model files
    material_file: str = "obj.mtl"  # Material library, loaded first
    mesh_file: str = "obj.obj"  # Mesh, loaded with the material applied
    read_chunk_size: int = 1 << 16  # Bytes per read; each chunk reports progress

    # --- Auto-framing ---
    fill_ratio: float = 3.2  # Largest model dimension relative to viewport height
    shift_ratio: float = 0.4  # Downward shift relative to viewport height
    reorientation_deg: tuple = (-90.0, 90.0, 0.0)  # Fixed XYZ Euler applied to the mesh

    # --- Idle rotation ---
    rotation_axis: int = 2  # Pivot axis driven by the animator (0=x, 1=y, 2=z)
    rotation_tolerance: float = 0.001  # Radians; below this a new target is drawn
    rotation_approach: float = 0.0015  # Fraction of remaining angle covered per frame
    rotation_min_deg: float = 3.0  # Smallest random target offset (degrees)
    rotation_max_deg: float = 16.0  # Largest random target offset (degrees)
    seed: int | None = None  # Seed for the rotation RNG; None for system entropy
    frame_rate_independent: bool = (
        False  # Scale the approach by elapsed time instead of one step per frame
    )
    reference_fps: float = 60.0  # Frame rate the per-frame constants were tuned for
    dt_clamp: float = 0.1  # Maximum time delta fed to the animator (in seconds)

    # --- Rendering ---
    grayscale: bool = True  # Apply the grayscale post-processing pass
    exposure: float = 0.9  # Tone mapping exposure
    ambient_intensity: float = 0.5  # White ambient light
    key_light_position: tuple = (5.0, 5.0, 5.0)  # Main directional light
    key_light_intensity: float = 1.0
    fill_light_position: tuple = (-5.0, -2.0, -5.0)  # Fill directional light
    fill_light_intensity: float = 0.5
