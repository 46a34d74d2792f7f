import sys
import os
import importlib.util
from pathlib import Path
import numpy as np
from .core import SDFNode
from .camera import Camera
from .debug import Debug
from .interaction import InteractionController, GestureEvent, PRESS, RELEASE, PRIMARY, SECONDARY
from .io import load_matcap, save_image
from .render import new_image, render
from .shading import default_matcap

try:
    from watchdog.observers import Observer
    from watchdog.events import FileSystemEventHandler
    WATCHDOG_AVAILABLE = True
except ImportError:
    WATCHDOG_AVAILABLE = False

_IS_RELOADING = False

VERTEX_SHADER = """
    #version 330 core
    in vec2 in_vert;
    out vec2 v_uv;
    void main() {
        // Image row 0 is the top of the window.
        v_uv = vec2(in_vert.x, -in_vert.y) * 0.5 + 0.5;
        gl_Position = vec4(in_vert, 0.0, 1.0);
    }
"""

FRAGMENT_SHADER = """
    #version 330 core
    uniform sampler2D u_frame;
    in vec2 v_uv;
    out vec4 f_color;
    void main() { f_color = vec4(texture(u_frame, v_uv).rgb, 1.0); }
"""

def translate_mouse_event(button, action, mods, x, y):
    """Converts a GLFW mouse button callback into a GestureEvent, or None for other buttons."""
    import glfw

    if button == glfw.MOUSE_BUTTON_LEFT:
        gesture_button = PRIMARY
    elif button == glfw.MOUSE_BUTTON_RIGHT:
        gesture_button = SECONDARY
    else:
        return None

    if action == glfw.PRESS:
        kind = PRESS
    elif action == glfw.RELEASE:
        kind = RELEASE
    else:
        return None
    return GestureEvent(kind, gesture_button, x, y, shift=bool(mods & glfw.MOD_SHIFT))


class Viewer:
    """
    A window showing the sphere-traced image of a model.

    Left drag orbits the camera, shift + left drag scales, right drag pans.
    Keys: 'r' resets the camera, 's' saves the frame, Esc quits. The image is
    re-rendered once per completed drag.
    """
    def __init__(self, model: SDFNode, matcap=None, camera: Camera = None, debug: Debug = None, watch=True,
                 width=512, height=512, save_path='result/result.png', verbose=True, **kwargs):
        self.model = model
        if isinstance(matcap, (str, Path)):
            matcap = load_matcap(matcap)
        self.matcap = matcap if matcap is not None else default_matcap()
        self.debug = debug
        self.watching = watch and WATCHDOG_AVAILABLE
        self.width = width
        self.height = height
        self.save_path = save_path
        self.verbose = verbose
        self.trace_kwargs = kwargs
        self.image = new_image(width, height)
        self.controller = InteractionController(camera, width, height, on_change=self._on_camera_change)
        self.window = None
        self.ctx = None
        self.texture = None
        self.vao = None
        self.dirty = False
        self.script_path = os.path.abspath(sys.argv[0])
        self.reload_pending = False

    def refresh(self):
        """Renders the current model from the current camera into the pixel buffer."""
        render(self.image, self.model, self.matcap, camera=self.controller.camera,
               verbose=self.verbose, debug=self.debug, **self.trace_kwargs)
        self.dirty = True

    def _on_camera_change(self, camera: Camera):
        self.refresh()

    def on_mouse_button(self, window, button, action, mods):
        import glfw
        x, y = glfw.get_cursor_pos(window)
        event = translate_mouse_event(button, action, mods, x, y)
        if event is not None:
            self.controller.handle(event)

    def on_key(self, window, key, scancode, action, mods):
        import glfw
        if action != glfw.PRESS:
            return
        if key == glfw.KEY_ESCAPE:
            glfw.set_window_should_close(window, True)
        elif key == glfw.KEY_R:
            print("INFO: Resetting camera.", file=sys.stderr)
            self.controller.home()
        elif key == glfw.KEY_S:
            save_image(self.save_path, self.image)

    def _reload_script(self):
        """Dynamically reloads the user's script and re-renders with the model it returns."""
        global _IS_RELOADING
        print(f"INFO: Change detected in '{Path(self.script_path).name}'. Reloading...", file=sys.stderr)

        _IS_RELOADING = True
        try:
            spec = importlib.util.spec_from_file_location("user_script", self.script_path)
            module = importlib.util.module_from_spec(spec)
            spec.loader.exec_module(module)

            if hasattr(module, 'main') and callable(module.main):
                result = module.main()
                new_model, new_camera = None, None

                if isinstance(result, SDFNode):
                    new_model = result
                elif isinstance(result, tuple):
                    for item in result:
                        if isinstance(item, SDFNode): new_model = item
                        if isinstance(item, Camera): new_camera = item

                if new_model:
                    self.model = new_model
                    if new_camera:
                        self.controller.camera = new_camera
                    self.refresh()
            else:
                print("WARNING: No valid `main` function found in script. Cannot reload.", file=sys.stderr)
        except Exception as e:
            print(f"ERROR: Failed to reload script: {e}", file=sys.stderr)
        finally:
            _IS_RELOADING = False

    def _start_watcher(self):
        """Initializes and starts the watchdog file observer."""
        if not self.watching:
            if not WATCHDOG_AVAILABLE:
                print("INFO: Hot-reloading disabled. `watchdog` not installed. Run 'pip install watchdog'.", file=sys.stderr)
            return

        class ChangeHandler(FileSystemEventHandler):
            def __init__(self, viewer_instance):
                self.viewer = viewer_instance
            def on_modified(self, event):
                if event.src_path == self.viewer.script_path:
                    self.viewer.reload_pending = True

        observer = Observer()
        observer.schedule(ChangeHandler(self), str(Path(self.script_path).parent), recursive=False)
        observer.daemon = True
        observer.start()
        print(f"INFO: Watching '{Path(self.script_path).name}' for changes...", file=sys.stderr)

    def _upload(self):
        self.texture.write(self.image.tobytes())
        self.dirty = False

    def run(self):
        import glfw
        import moderngl

        if not glfw.init():
            raise RuntimeError("Could not initialize GLFW")

        glfw.window_hint(glfw.RESIZABLE, False)
        self.window = glfw.create_window(self.width, self.height, "sdtrace", None, None)
        if not self.window:
            glfw.terminate()
            raise RuntimeError("Could not create GLFW window.")
        glfw.make_context_current(self.window)
        glfw.set_mouse_button_callback(self.window, self.on_mouse_button)
        glfw.set_key_callback(self.window, self.on_key)

        self.ctx = moderngl.create_context()
        program = self.ctx.program(vertex_shader=VERTEX_SHADER, fragment_shader=FRAGMENT_SHADER)
        vertices = np.array([-1.0, -1.0, -1.0, 1.0, 1.0, -1.0, 1.0, 1.0], dtype='f4')
        vbo = self.ctx.buffer(vertices)
        self.vao = self.ctx.simple_vertex_array(program, vbo, 'in_vert')
        self.texture = self.ctx.texture((self.width, self.height), 3, alignment=1)
        self.texture.filter = (moderngl.NEAREST, moderngl.NEAREST)

        self.refresh()
        self._start_watcher()

        while not glfw.window_should_close(self.window):
            if self.reload_pending:
                self.reload_pending = False
                self._reload_script()
            if self.dirty:
                self._upload()

            width, height = glfw.get_framebuffer_size(self.window)
            self.ctx.viewport = (0, 0, width, height)
            self.ctx.clear(1.0, 1.0, 1.0)
            self.texture.use(location=0)
            self.vao.render(mode=moderngl.TRIANGLE_STRIP)
            glfw.swap_buffers(self.window)
            glfw.wait_events_timeout(0.05)

        glfw.terminate()


def show(model: SDFNode, matcap=None, camera: Camera = None, debug: Debug = None, watch=True, **kwargs):
    """
    Public API to open the interactive viewer.

    Args:
        model (SDFNode): The model to render.
        matcap (str, Path or np.ndarray, optional): Matcap image or its path.
                                                    Defaults to a generated matcap.
        camera (Camera, optional): The starting camera. Defaults to the home camera.
        debug (Debug, optional): Debug visualization mode.
        watch (bool, optional): Whether to watch the script file for changes (hot-reloading).
        **kwargs: Additional arguments for the viewer (`width`, `height`, `save_path`,
                  `verbose`) and sphere tracing overrides.
    """
    if _IS_RELOADING:
        return

    try:
        import moderngl, glfw
    except ImportError:
        print("ERROR: The interactive viewer requires 'moderngl' and 'glfw'.", file=sys.stderr)
        print("       Use `.save_frame(path)` to render without a window.", file=sys.stderr)
        return

    if not os.environ.get("DISPLAY") and sys.platform == 'linux':
        print("WARNING: No display detected. Window creation may fail.", file=sys.stderr)

    viewer = Viewer(model, matcap=matcap, camera=camera, debug=debug, watch=watch, **kwargs)
    try:
        viewer.run()
    except RuntimeError as e:
        print(f"ERROR: Failed to launch native window: {e}", file=sys.stderr)
        print("       This often happens due to missing drivers or a headless environment.", file=sys.stderr)
        print("       Use `.save_frame(path)` to render without a window.", file=sys.stderr)
