# glennmania

A small multiplayer side-scrolling platformer. One server owns the shared
world (platforms, a moving item, the connected characters) and publishes its
state about a hundred times a second while any client is connected; each
client draws that world in a pygame window, moves its own character locally
and reports its position and inputs back to the server.

## Installing

```
pip install .
```

This pulls in `pyzmq` for networking and `pygame` for the window.

## Playing

Start the server first:

```
glennmania-server
```

By default it answers client requests on `tcp://*:5555` and publishes the
world on `tcp://*:5556`; `--rep` and `--pub` take other addresses.

Then start one client per player:

```
glennmania-client
```

The client connects to `localhost` on ports 5555 and 5556 unless given
`--host`, `--req-port` or `--sub-port`. The server assigns each client its
character id when it connects. A client that sends nothing for a sweep
interval of two seconds is treated as disconnected and its character is
removed.

Controls in the client window:

- Left / Right arrows: run
- Up arrow or Space: jump; Down arrow: push the character downwards
- `1`, `2`, `3`: half, normal and double game speed, applied on the server
- `P`: pause or resume the server's timeline
- Closing the window disconnects the player and removes the character

Falling into the death zone at the bottom of the level parks the character
off screen for two seconds, after which it respawns at the spawn point.

## Using the pieces

The game logic can be used without the network layer:

- `glennmania.timeline.Timeline` keeps timestamps, delta time and the tic
  size (`SCALE_HALF`, `SCALE_REAL`, `SCALE_DOUBLE`, and zero while paused);
  it takes an optional clock function, which makes it easy to drive in tests.
- `glennmania.event.Event` carries an `EventType` and typed parameters
  keyed by `VariantType`; `glennmania.event_handler.EventHandler` queues
  events by timestamp and `handle_events()` processes those that are due.
- `glennmania.geometry` provides `Vector2` and `Rect`;
  `glennmania.collider` has `is_character_grounded()` and
  `check_collision()`.
- `glennmania.objects` holds `Platform`, `Item`, `DeathZone`,
  `SideBoundary` and `SpawnPoint`; `glennmania.character.Character` is the
  player's character; `glennmania.mover` provides the repeating
  `ClockwiseMovement`, `LeftRightMovement` and `UpDownMovement` patterns.
- `glennmania.server_state.ServerGameState` advances the world, turns
  client input codes into events and `serialize()`s the world as
  `[ dt ticSize ][ id x y vx vy type ]...`;
  `glennmania.client_state.ClientGameState.deserialize()` reads that format
  back, creating unknown characters and removing objects no longer listed.
- `glennmania.server.GameServer` handles one request at a time with
  `handle_request()`, drops silent clients with `sweep_disconnects()` and
  advances the world with `tick()`, so it can be driven by hand or embedded
  elsewhere; `run()` serves over ZeroMQ.
- `glennmania.runner.GameRunner` draws a client state onto a pygame surface,
  following the character with `view_center()`.
- `glennmania.client` has the request helpers `format_request()`,
  `decode_client_id()` and `dedupe_adjacent()`, and `TripleUpDetector`.

## What it does not do

- There is no scripting engine. `EventHandler.add_script_manager()` and
  `GameServer.script_manager` accept any object with a
  `run_one(name, reload, context)` method, but none is provided, so the
  scripted triple-up handler and the server's scripted push of the moving
  item do nothing out of the box.
- Pressing Up three times quickly is detected and sent to the server as
  input code 5, which the server ignores.
- No images are shipped. Characters and the item are drawn from
  `images/girl.png` and `images/money.png` relative to the working
  directory when those files exist, and as plain rectangles otherwise.

## Running the tests

```
pip install .[test]
pytest
```