"""Pygame viewer driving the animated cube."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np
import pygame

from .camera import OrbitCamera, orbit_speed
from .cube import Cube
from .dynamics import SecondOrderParameters, SecondOrderSystem
from .facelets import SURFACE_NORMALS, Color
from .frame import FrameClock, FrameInput, PageScroll, Resize
from .moves import parse_move

BG = (18, 22, 30)
LINE = (28, 32, 42)
TEXT = (220, 225, 235)

KEY_TO_FACE = {
    pygame.K_l: "L",
    pygame.K_r: "R",
    pygame.K_u: "U",
    pygame.K_d: "D",
    pygame.K_f: "F",
    pygame.K_b: "B",
}


@dataclass
class ViewerConfig:
    size: tuple[int, int] = (960, 640)
    fps: int = 60
    focal: float = 520.0
    distance: float = 9.0
    min_distance: float = 5.0
    max_distance: float = 20.0
    scroll_step: float = 0.6
    # Zoom smoothing, frequency in cycles per second.
    zoom_freq: float = 1.5
    zoom_zeta: float = 1.0
    zoom_r: float = 0.0
    auto_orbit: bool = True


def _surface_quads() -> list[np.ndarray]:
    """Corner points (homogeneous) of each unit-cube surface, SURFACE_NORMALS order."""
    quads = []
    for normal in SURFACE_NORMALS:
        axis = next(i for i, v in enumerate(normal) if v != 0)
        a, b = [i for i in range(3) if i != axis]
        corners = []
        for sa, sb in ((-1, -1), (1, -1), (1, 1), (-1, 1)):
            p = [0.0, 0.0, 0.0, 1.0]
            p[axis] = float(normal[axis])
            p[a] = float(sa)
            p[b] = float(sb)
            corners.append(p)
        quads.append(np.array(corners, dtype=np.float64))
    return quads


SURFACE_QUADS = _surface_quads()


class RubikViewer:
    def __init__(self, cube: Cube, config: ViewerConfig | None = None):
        self.cube = cube
        self.config = config or ViewerConfig()
        self.size = self.config.size

        pygame.init()
        self.screen = pygame.display.set_mode(self.size, pygame.RESIZABLE)
        pygame.display.set_caption("Rubik 3x3 Motion")
        self.clock = pygame.time.Clock()
        self.frames = FrameClock(now_ms=pygame.time.get_ticks)

        self.font = pygame.font.SysFont("monospace", 18)
        self.small_font = pygame.font.SysFont("monospace", 14)

        self.camera = OrbitCamera()
        self.camera.set_distance(self.config.distance)
        self.scroll = 0.0
        self.scroll_offset = 0.0
        self.zoom_target = self.config.distance
        self.zoom = SecondOrderSystem(
            SecondOrderParameters(self.config.zoom_freq, self.config.zoom_zeta, self.config.zoom_r),
            self.config.distance,
        )

        self.dragging = False
        self.last_mouse = (0, 0)
        print(
            f"viewer_init size={self.size[0]}x{self.size[1]} fps={self.config.fps} "
            f"move_time={self.cube.move_time} move_slope={self.cube.move_slope}",
            flush=True,
        )

    def queue_key(self, key: int, shift: bool = False) -> bool:
        face = KEY_TO_FACE.get(key)
        if face is None:
            return False
        self.cube.queue(parse_move(face + ("'" if shift else "")))
        return True

    def handle_frame(self, frame: FrameInput) -> None:
        for event in frame.events:
            if isinstance(event, PageScroll):
                self.scroll = event.offset
                target = self.config.distance - event.offset * self.config.scroll_step
                self.zoom_target = max(self.config.min_distance, min(self.config.max_distance, target))
            elif isinstance(event, Resize):
                self.size = (max(1, event.width), max(1, event.height))

        self.cube.step(frame)

        self.zoom.update(frame.frame_time / 1000.0, self.zoom_target)
        self.camera.set_distance(self.zoom.value())

        if self.config.auto_orbit and not self.dragging:
            theta_speed, phi_speed = orbit_speed(frame.time)
            self.camera.orbit(frame.frame_time * theta_speed, frame.frame_time * phi_speed)

    def _draw_cube(self) -> None:
        view = self.camera.view_matrix()
        draw_items = []
        for piece in self.cube.pieces:
            model = view @ piece.world_matrix()
            for quad, outward, color in zip(SURFACE_QUADS, SURFACE_NORMALS, piece.surface_colors()):
                pts_view = (model @ quad.T).T[:, :3]
                center = pts_view.mean(axis=0)
                normal = model[:3, :3] @ np.asarray(outward, dtype=np.float64)
                if float(np.dot(normal, center)) >= 0.0:
                    continue

                poly = [OrbitCamera.project(p, self.size, self.config.focal) for p in pts_view]
                if any(pt is None for pt in poly):
                    continue
                draw_items.append((float(center[2]), poly, color))

        draw_items.sort(key=lambda x: x[0])
        for _, poly, color in draw_items:
            pygame.draw.polygon(self.screen, color.rgb, poly)
            if color is not Color.NONE:
                pygame.draw.polygon(self.screen, LINE, poly, 2)

    def _draw_hud(self) -> None:
        payload = self.cube.state_payload()
        header = self.font.render(
            f"move={payload['current_move'] or '-'} | applied={payload['moves_applied']} | solved={payload['solved']}",
            True,
            TEXT,
        )
        pending = self.small_font.render(f"queue: {payload['pending'] or '(empty)'}", True, TEXT)
        controls = self.small_font.render(
            "Keys: L R U D F B (shift = prime) | drag to orbit | wheel to zoom | ESC",
            True,
            TEXT,
        )
        self.screen.blit(header, (24, 18))
        self.screen.blit(pending, (24, 46))
        self.screen.blit(controls, (24, self.size[1] - 30))

    def draw(self) -> None:
        self.screen.fill(BG)
        self._draw_cube()
        self._draw_hud()

    def run(self) -> None:
        running = True

        while running:
            self.clock.tick(self.config.fps)

            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False

                elif event.type == pygame.KEYDOWN:
                    if event.key in (pygame.K_ESCAPE, pygame.K_q):
                        running = False
                    else:
                        self.queue_key(event.key, shift=bool(event.mod & pygame.KMOD_SHIFT))

                elif event.type == pygame.MOUSEWHEEL:
                    self.scroll_offset += event.y
                    self.frames.post(PageScroll(self.scroll_offset))

                elif event.type == pygame.VIDEORESIZE:
                    self.screen = pygame.display.set_mode((event.w, event.h), pygame.RESIZABLE)
                    self.frames.post(Resize(event.w, event.h))

                elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                    self.dragging = True
                    self.last_mouse = event.pos

                elif event.type == pygame.MOUSEBUTTONUP and event.button == 1:
                    self.dragging = False

                elif event.type == pygame.MOUSEMOTION and self.dragging:
                    dx = event.pos[0] - self.last_mouse[0]
                    dy = event.pos[1] - self.last_mouse[1]
                    self.last_mouse = event.pos
                    self.camera.orbit(-dx * 0.01, -dy * 0.01)

            self.handle_frame(self.frames.tick())
            self.draw()
            pygame.display.flip()

        print(f"viewer_done moves_applied={self.cube.moves_applied}", flush=True)
        pygame.quit()
