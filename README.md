# raycub

A small first-person maze explorer in the classic raycasting style, drawn
in a pygame window. A scene is described by a `.cub` file: screen
resolution, wall and sprite textures in XPM format, floor and ceiling
colours, and a grid map. The map must be closed by walls and hold exactly
one player start.

## Installing

    pip install .

## Running

    raycub scene.cub

Pass `--save` as the second argument to render one frame into `save.bmp`
in the current directory and exit instead of opening a window:

    raycub scene.cub --save

Any other extra argument is refused. On any error the command prints a
message starting with `Error` and exits with status 1.

### Controls

- `W` / `S`: move forward / backward
- `A` / `D`: strafe left / right
- Left / Right arrows: turn by 2 degrees per frame
- Left Shift: crouch (movement at 0.3 of normal speed, view shifted 100
  pixels vertically)
- `Esc` or closing the window: quit

Walls block movement; sprite cells do not.

## Scene file format

    R 1280 720
    NO ./textures/north.xpm
    SO ./textures/south.xpm
    WE ./textures/west.xpm
    EA ./textures/east.xpm
    S ./textures/sprite.xpm
    F 120,100,80
    C 30,60,200

    11111
    10201
    1N001
    11111

- `R`: width and height as plain digits. A width above 2560 or a height
  above 1395 is capped; a resolution below 500x500 is accepted with a
  logged warning.
- `NO`, `SO`, `WE`, `EA`: wall textures; `S`: sprite texture. Each takes
  exactly one path.
- `F`, `C`: floor and ceiling colours as `r,g,b`, each component 0 to 255.
- Each identifier may appear only once. Empty lines are skipped; any other
  unknown line is an error.
- The map begins at the first line starting with `0`, `1` or `2` and runs
  to the end of the file. Cells: `1` wall, `0` floor, `2` sprite, and one
  of `N`, `S`, `E`, `W` for the player start and facing. Spaces in map
  lines are removed, and all rows must then have the same width. The area
  the player can walk through must not reach the border of the map.

Sprite texels of colour `#FF0000` are drawn as transparent.

## Using it as a library

    from raycub.config import load_config, validate_config, fit_resolution
    from raycub.textures import load_textures
    from raycub.render import render_frame
    from raycub.bitmap import save_bmp

    config = load_config("scene.cub")
    validate_config(config)
    config = fit_resolution(config)
    textures = load_textures(config)
    frame = render_frame(config, config.grid, config.grid.initial_camera(), textures, 0)
    save_bmp(frame, "shot.bmp")

Other pieces:

- `raycub.config.parse_config` parses scene lines already in memory.
- `raycub.mapgrid.GameMap` holds a map (`from_rows`, `validate`,
  `initial_camera`).
- `raycub.player.Player` applies held `Action`s to a camera with `update`.
- `raycub.app.Game` ties a scene, its textures and the player together;
  `Game.step` renders one frame and `Game.run` opens the window.
- `raycub.xpm.load_xpm` and `raycub.xpm.parse_xpm_text` read XPM images on
  their own, and `raycub.colors.lookup_color` resolves X11 colour names.
- `raycub.bitmap.bmp_bytes` encodes a frame as 24-bit BMP data.

Errors are raised as `raycub.errors.CubError` subclasses: `ConfigError`,
`MapError` and `TextureError`.

## Limits

Only XPM textures are read, and only BMP screenshots are written. There is
no mouse control, no sound, and no collision with sprites.