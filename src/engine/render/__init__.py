"""
どこで: `engine.render` サブパッケージ。
何を: 時計フレームの描画先。座標変換ヘルパ（純関数）と pyglet の `ClockWindow` を提供。
なぜ: 計算（core/clock）と描画の責務を分離し、GUI 依存を局所化するため。

`clock_window` は pyglet を import するため、ここでは再輸出しない（ヘッドレス環境での import を避ける）。
"""
